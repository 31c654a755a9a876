"""Nursing calendar presentation layer."""

from .composer import AppointmentMessageComposer

__all__ = ["AppointmentMessageComposer"]
