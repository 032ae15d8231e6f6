"""Core building blocks shared by all role manager features."""
