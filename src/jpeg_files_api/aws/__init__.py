"""AWS client management for the JPEG Files API."""
