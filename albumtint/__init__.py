"""Album-art driven colour palettes for music player theming."""
