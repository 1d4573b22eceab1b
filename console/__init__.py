"""
Presentation state of the fleet console: API client, views and forms.

Markup lives elsewhere; these objects hold what each screen shows and
how it reacts to user actions.
"""
