from uuid import uuid4

import pytest

from cookbook_api.core.exceptions import NotFoundError
from cookbook_api.schemas.recipe import RecipeCreate, RecipeUpdate
from cookbook_api.services import recipe_service


def test_create_and_find_recipe(db, make_user):
    author = make_user()

    recipe = recipe_service.create_recipe(
        db,
        RecipeCreate(
            author_id=author.id,
            title="Risotto",
            ingredients=["320 g carnaroli rice", "  ", "1 l broth"],
            difficulty="Medium",
            tags=["Comfort", " "],
        ),
    )

    found = recipe_service.find_recipe(db, recipe.id)
    assert found.title == "Risotto"
    assert found.author_id == author.id
    assert found.ingredients == ["320 g carnaroli rice", "1 l broth"]
    assert found.difficulty == "medium"
    assert found.tags == ["comfort"]


def test_find_recipe_missing(db):
    with pytest.raises(NotFoundError):
        recipe_service.find_recipe(db, uuid4())


def test_find_recipes_pages_by_index(db, make_user, make_recipe):
    author = make_user()
    for i in range(5):
        make_recipe(author, title=f"recipe {i}")

    everything = recipe_service.find_recipes(db)
    assert everything.total_items == 5
    assert everything.items_per_page == 5
    assert len(everything.recipes) == 5

    last_page = recipe_service.find_recipes(db, limit=2, page=2)
    assert len(last_page.recipes) == 1
    assert last_page.item_count == 2
    assert last_page.items_per_page == 1
    assert last_page.current_page == 2


def test_find_recipes_by_user_only_returns_authored(db, make_user, make_recipe):
    julia = make_user()
    marco = make_user(name="Marco", email="marco@example.com")
    make_recipe(julia, title="Julia's")
    make_recipe(marco, title="Marco's")
    make_recipe(marco, title="Marco's second")

    page = recipe_service.find_recipes_by_user(db, marco.id)

    assert page.total_items == 2
    assert {recipe.title for recipe in page.recipes} == {"Marco's", "Marco's second"}


def test_update_recipe_is_partial(db, make_user, make_recipe):
    recipe = make_recipe(make_user(), description="old", servings=2)

    updated = recipe_service.update_recipe(db, recipe, RecipeUpdate(description="new", title=None))

    assert updated.description == "new"
    assert updated.title == "Pasta al Pomodoro"
    assert updated.servings == 2


def test_delete_recipe_reports_affected_rows(db, make_user, make_recipe):
    recipe_id = make_recipe(make_user()).id

    assert recipe_service.delete_recipe(db, recipe_id) == 1
    assert recipe_service.delete_recipe(db, recipe_id) == 0


def test_page_far_past_the_end_is_empty(db, make_user, make_recipe):
    make_recipe(make_user())

    page = recipe_service.find_recipes(db, limit=100, page=10**18)

    assert page.recipes == []
    assert page.total_items == 1
    assert page.items_per_page == 0
