class DiagramError(Exception):
    pass


class ConfigurationError(DiagramError):
    pass


class InvalidTreeError(DiagramError):
    pass


class MeasurementError(DiagramError):
    pass


class LayoutOverflowError(DiagramError):
    pass
