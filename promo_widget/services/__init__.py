"""Widget generation services.

Modules are imported directly (``promo_widget.services.markup`` etc.); the
package itself re-exports nothing to keep import order free of cycles.
"""
