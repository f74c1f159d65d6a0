"""Surface hosting for dialog orchestrators.

This package defines the props handed to confirmation and input-form
surfaces and the host abstraction that places those surfaces on screen,
without binding to a specific UI framework.
"""
