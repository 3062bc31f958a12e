"""AI layer: the rule-based agent response engine and external providers."""
