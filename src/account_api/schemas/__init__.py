"""Request payload schemas and their validation rules."""
