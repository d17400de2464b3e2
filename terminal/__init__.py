"""Terminal front end: console prompts and text rendering."""
