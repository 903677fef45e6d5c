"""Traffic simulation logic: geometry, collisions, blocking rules, car and tram speeds, lights and scenarios."""

__version__ = "0.1.0"