"""
Comment rules and the engine that dispatches tokens to them.

Rules live in category packages (e.g. ``commenting``) and declare the
token categories they listen for; ``engine.RuleEngine`` routes comment
tokens to them and collects the resulting diagnostics.
"""
