"""Configuration, enums and exceptions shared by the mapping layer."""
