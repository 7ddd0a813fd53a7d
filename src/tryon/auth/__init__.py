"""Bearer-token authentication delegated to the hosting platform."""
