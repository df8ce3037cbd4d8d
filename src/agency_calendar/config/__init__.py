"""Runtime settings and saved view presets."""
