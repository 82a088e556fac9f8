"""
Fixed vocabularies and limits.
"""

# Roles, see models.user.UserRole
ROLE_ADMIN = "admin"  # may change roles and delete accounts
ROLE_EDITOR = "editor"
ROLE_USER = "user"  # given to every new registration

# Recipe difficulty, stored lowercase
VALID_DIFFICULTIES = ["easy", "medium", "hard"]

# Largest `limit` accepted by list endpoints; 0 means "no limit"
MAX_PAGE_SIZE = 100

# Largest user `offset` and recipe `page` accepted by list endpoints
MAX_OFFSET = 1_000_000
MAX_PAGE_INDEX = MAX_OFFSET // MAX_PAGE_SIZE

MIN_PASSWORD_LENGTH = 8

# bcrypt cost for new hashes; stored hashes below it are upgraded at login
BCRYPT_ROUNDS = 12
