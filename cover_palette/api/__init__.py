"""HTTP surface: cover fetching and the palette API."""
