"""Artifact writing and the batch entry point."""

__all__ = ["export_manager", "gadget_exporter"]
