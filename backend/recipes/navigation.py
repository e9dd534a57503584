"""
Screen navigation for recipe book clients.

The client shows exactly one of four screens. Each screen is its own type so
the recipe a screen works on travels with it:

    ListView -> DetailView(recipe_id)   select_recipe
    ListView -> FormView(None)          new_recipe
    DetailView -> FormView(recipe_id)   edit_recipe
    FormView -> ListView                save_recipe / cancel
    DetailView -> ListView              back
    any -> MaterialsView / ListView     show_materials / show_recipes
"""
from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class ListView:
    name: ClassVar[str] = "RECIPE_LIST"


@dataclass(frozen=True)
class DetailView:
    recipe_id: str
    name: ClassVar[str] = "RECIPE_DETAIL"


@dataclass(frozen=True)
class FormView:
    recipe_id: Optional[str] = None  # None while creating a new recipe
    name: ClassVar[str] = "RECIPE_FORM"

    @property
    def is_new(self) -> bool:
        return self.recipe_id is None


@dataclass(frozen=True)
class MaterialsView:
    name: ClassVar[str] = "RAW_MATERIALS"


View = Union[ListView, DetailView, FormView, MaterialsView]


class InvalidTransition(Exception):
    """Raised when an action is not available on the current screen."""

    def __init__(self, action, view, message=None):
        self.action = action
        self.view = view
        if message is None:
            message = f"Cannot {action} from {view.name}"
        super().__init__(message)


class Navigator:
    """Holds the current screen and applies user actions to it."""

    def __init__(self, view: View = None):
        self.view: View = view or ListView()

    def _expect(self, action, *allowed):
        if not isinstance(self.view, allowed):
            raise InvalidTransition(action, self.view)

    def select_recipe(self, recipe_id: str) -> View:
        self._expect("select a recipe", ListView)
        self.view = DetailView(recipe_id)
        return self.view

    def new_recipe(self) -> View:
        self._expect("create a recipe", ListView)
        self.view = FormView()
        return self.view

    def edit_recipe(self) -> View:
        self._expect("edit a recipe", DetailView)
        self.view = FormView(self.view.recipe_id)
        return self.view

    def save_recipe(self) -> View:
        self._expect("save a recipe", FormView)
        self.view = ListView()
        return self.view

    def cancel(self) -> View:
        self._expect("cancel", FormView)
        self.view = ListView()
        return self.view

    def back(self) -> View:
        self._expect("go back", DetailView)
        self.view = ListView()
        return self.view

    def show_materials(self) -> View:
        self.view = MaterialsView()
        return self.view

    def show_recipes(self) -> View:
        self.view = ListView()
        return self.view
