"""Core road generation components."""
