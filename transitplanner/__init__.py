"""Multi-modal route planning over OpenStreetMap data and CSV bus systems, with KML export."""

__version__ = "0.1.0"