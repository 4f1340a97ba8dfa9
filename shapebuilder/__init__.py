"""ShapeBuilder (SHB): editor de formas bezier con export normalizado."""

from shapebuilder.core.version import APP_VERSION as __version__
