from deedseal.lib.store import InMemoryIdentifierStore


class ServerState:
    """A simple in-memory store for application state."""

    def __init__(self):
        # identifiers: { id_hex: { "owner": ..., "encrypted": ... } }
        self.identifiers = InMemoryIdentifierStore()

    def reset(self):
        """Drops all allocated identifiers (used by tests)."""
        self.identifiers.clear()


state = ServerState()


def get_app_state() -> ServerState:
    """FastAPI dependency returning the process-wide state."""
    return state
