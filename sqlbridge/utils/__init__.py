"""Utility functions and helpers for sqlbridge."""

from sqlbridge.utils import logging, serializers, type_guards

__all__ = ("logging", "serializers", "type_guards")
