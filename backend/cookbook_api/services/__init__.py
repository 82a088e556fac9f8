"""
Services
The user and recipe directories, token issuing, pagination and error logging.

Routers call into these modules and translate nothing themselves:
failures surface as cookbook_api.core.exceptions.ServiceError.
"""
