"""HTTP routers: unversioned auth routes and the versioned resource API."""
