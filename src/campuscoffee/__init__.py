"""CampusCoffee point-of-sale backend."""
