"""Typed models for gadget records and the exported payload."""

from .gadget import Gadget, GadgetData, GadgetDataPayload, GadgetPayload

__all__ = ["Gadget", "GadgetData", "GadgetDataPayload", "GadgetPayload"]
