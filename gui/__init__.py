"""
gui - Qt Background Workers for Batch Renaming Tool

Requires PySide6 (install the "gui" extra).
"""
