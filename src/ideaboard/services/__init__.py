"""Business logic shared by the API endpoints and scripts."""
