from octane_nexus.config.settings import settings

__all__ = ["settings"]
