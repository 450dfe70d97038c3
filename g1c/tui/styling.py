"""Textual CSS for the dashboard."""

TUI_CSS = """
Screen {
    layers: base overlay;
}

#title-bar {
    height: 1;
    padding: 0 1;
    background: $primary-darken-2;
}

#filter-bar {
    height: 1;
    padding: 0 1;
}

#overview {
    height: auto;
}

#instance-list {
    height: 1fr;
}

#status-bar {
    height: 1;
    padding: 0 1;
    background: $primary-darken-3;
}

#popup-layer {
    layer: overlay;
    width: 100%;
    height: 100%;
    align: center middle;
    display: none;
}

#help-popup {
    width: 60%;
    height: auto;
    max-height: 80%;
    background: $surface;
}

#details-popup {
    width: 80%;
    height: auto;
    max-height: 90%;
    background: $surface;
}
"""
