from .record import AuditRecord, RunStats  # noqa: F401
