"""Core — context, configuration, models and the install pipeline."""
