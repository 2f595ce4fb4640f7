"""Domain service marker."""


class Service:
    """Marker base for stateless engine services.

    Subclasses receive repositories, the clock and adapters through their
    constructor and are registered once per container.
    """
