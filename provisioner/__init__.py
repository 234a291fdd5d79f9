"""Local WordPress site provisioning on top of WP-CLI and Laravel Valet."""

__version__ = "0.1.0"
