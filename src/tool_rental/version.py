"""Version metadata for ToolRental Manager."""

__version__ = "1.0.0"
__app_name__ = "ToolRental Manager"
__company__ = "ToolRental"
