"""Centralized exceptions for the Notepress application."""


class NotepressError(Exception):
    """Base exception for all Notepress errors."""
