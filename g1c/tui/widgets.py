"""Widget identifiers for the dashboard layout."""

from enum import Enum


class WidgetID(str, Enum):
    """DOM ids of the dashboard's Static widgets."""

    TITLE = "title-bar"
    FILTER = "filter-bar"
    OVERVIEW = "overview"
    INSTANCES = "instance-list"
    STATUS = "status-bar"
    POPUP_LAYER = "popup-layer"
    HELP = "help-popup"
    DETAILS = "details-popup"

    def __str__(self) -> str:
        return self.value
