"""
Dash adapters: layout builders and callback registration around the core coordinator.
"""
