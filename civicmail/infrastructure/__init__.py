"""Infrastructure adapters: persistence, mail transports and link building."""
