"""WordPress provisioning steps.

Submodules:
- cli: WP-CLI wrapper
- site: request resolution and site directory
- db: MySQL database or SQLite drop-in
- sqlite: sqlite-integration plugin fetch/extract
- installer: core download/config/install and the `new` orchestration
"""

# Intentionally minimal; logic lives in submodules.
