"""Configuration — the optional ~/.wavu/wavu.conf.json file."""
