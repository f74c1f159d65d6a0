"""
Textual front-end for the dialog orchestrators.

Provides the built-in Renderer Set (modal screens and field widgets), a host
that pushes those screens on a running app, and small apps used by the CLI.
"""
