"""HTTP routers exposing draft editing and theme listing."""
