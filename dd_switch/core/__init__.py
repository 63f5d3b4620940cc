"""GUI-agnostic core of DD Switch: entry storage, activation, import."""
