"""Configuration – 12-factor settings and the option-list catalogue."""
