"""Resource endpoints built on :class:`cfapi.endpoint.Endpoint`."""
