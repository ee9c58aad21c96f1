from .slow_data_store import SlowDataStore

__all__ = ["SlowDataStore"]
