"""HTTP adapters: routers, schemas and error mapping."""
