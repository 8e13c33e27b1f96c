from .enums import DatabaseStatus, DiagnosticSeverity

__all__ = ["DatabaseStatus", "DiagnosticSeverity"]
