from medtrack.models.snapshot import StateSnapshot

__all__ = ["StateSnapshot"]
