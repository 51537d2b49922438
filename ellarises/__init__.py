"""
Ella Rises community website.

A server-rendered Flask application that provides the public marketing pages,
account signup and login, and the participant dashboard ("My Journey").

Context
-------
People frequently meet Ella Rises before they ever create a login: registering
for an event by e-mail alone creates a participant profile with no account
attached. When that person later signs up with the same address, the new
account claims the existing profile rather than creating a second one. Names
already on the profile are kept; blank ones are filled in from the signup
form.

After authenticating, a :class:`.domain.SessionIdentity` is placed in the
Flask session under ``SESSION_IDENTITY_KEY``. The rest of the application
reads it from there to gate the participant and administrative areas.
"""
