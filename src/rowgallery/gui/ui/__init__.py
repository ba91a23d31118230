"""Qt adapters that connect the layout engine to widgets."""
