"""HTTP middleware shared by every route."""
