# src/choropleth/core/exceptions.py
"""
Classification-related exceptions
"""


class ChoroplethError(Exception):
    """Base exception for the choropleth package"""

    pass


class ClassificationError(ChoroplethError):
    """Raised when a classification cannot be computed"""

    pass


class InvalidClassCountError(ClassificationError, ValueError):
    """Raised when the requested number of classes is below 1"""

    def __init__(self, num_classes):
        self.num_classes = num_classes
        super().__init__(f"Number of classes must be >= 1, got {num_classes!r}")


class UnknownMethodError(ClassificationError, ValueError):
    """Raised when a classification method key is not recognised"""

    pass


class InvalidColorError(ClassificationError, ValueError):
    """Raised when a color string cannot be parsed as hex"""

    pass


class NoDataError(ClassificationError):
    """Raised when an attribute has no parseable numeric value"""

    pass


class LayerNotFoundError(ChoroplethError, KeyError):
    """Raised when a layer id is not known to the registry"""

    def __init__(self, layer_id):
        self.layer_id = layer_id
        super().__init__(f"Layer '{layer_id}' not found")

    def __str__(self):
        return self.args[0]
