"""Host-side helpers: image loading and the command-line front end."""
