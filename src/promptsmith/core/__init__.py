"""Core prompt model, renderers, merge engine and validator."""
