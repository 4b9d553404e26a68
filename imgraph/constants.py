"""Constants"""

# pylint: disable=too-few-public-methods
class C:
    """Constants"""
    DEFAULT_CROP_X = 100
    DEFAULT_CROP_Y = 100
    DEFAULT_CROP_WIDTH = 50
    DEFAULT_CROP_HEIGHT = 50
    DEFAULT_JPEG_QUALITY = 90

    # How the editor should present a socket
    VIEW_NONE = "NONE"
    VIEW_SPINNER = "SPINNER"
    VIEW_SELECT = "SELECT"
