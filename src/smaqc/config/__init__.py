from .settings import DatasetRef, RunConfig, load_measurement_names

__all__ = ["DatasetRef", "RunConfig", "load_measurement_names"]
