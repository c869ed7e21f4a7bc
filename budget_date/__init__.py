"""BudgetDate: date-itinerary tools served over an MCP-style HTTP API."""

__version__ = "1.0.0"
