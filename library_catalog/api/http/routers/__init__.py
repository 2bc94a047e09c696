"""HTTP routers, one per catalog resource."""
