"""Host-management API for a small network-attached-storage appliance."""

__version__ = "0.1.0"
