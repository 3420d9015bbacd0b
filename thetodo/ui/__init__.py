"""Terminal front end for The Todo client."""
