from __future__ import annotations
from typing import Dict, List, Type

from .base_view import BaseView


class ViewRegistry:
    """
    Ordered collection of dashboard view classes, keyed by view id.

    The layout builds one tab per registered class and the render callbacks
    instantiate views through create(), so adding a tab never touches the
    UI code. Classes are stored, not instances: a view is created against
    the DatasetStore each time it renders.

    Registration order is tab order.
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Add a view class.

        Raises:
            TypeError: view_cls is not a BaseView subclass
            ValueError: another view already uses the same id
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._views[view_cls.id] = view_cls

    def create(self, view_id: str, store) -> BaseView:
        """
        :param view_id: id of a registered view
        :param store: the DatasetStore the view reads from
        :return: a fresh view instance

        Raises:
            KeyError: no view is registered under view_id
        """
        try:
            cls = self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found")
        return cls(store)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())
