"""Behavior base class for embedded views.

A behavior is the scripted logic attached to a template. Instances share the
template's behavior class; the host creates one behavior object per view and
forwards lifecycle notifications to it.
"""

from abc import ABC
from typing import Any


class ViewBehavior(ABC):
    """Base class for behaviors attached to templates and instances.

    Subclasses override the hooks they need. Both hooks are no-ops by default
    so a behavior only interested in layout does not have to handle
    instantiation and vice versa.

    Example:
        class CounterBehavior(ViewBehavior):
            def on_instantiated(self, view):
                self.count = 0

            def on_recalculate_geometry(self, view):
                view.findChild(QLabel).resize(view.width(), 20)
    """

    def on_instantiated(self, view: Any) -> None:
        """Called after the view's content has been (re)built."""

    def on_recalculate_geometry(self, view: Any) -> None:
        """Called when children should be sized to the view's current rect."""
