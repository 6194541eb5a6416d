"""Mapping of key events to application actions."""