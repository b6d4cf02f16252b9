"""Terminal menus and prompts (Rich)."""
