from clock_server.services.clock import Clock, utc_now


def get_clock() -> Clock:
    """FastAPI dependency that provides the wall clock."""
    return utc_now
