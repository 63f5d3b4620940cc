"""Tkinter front-end for DD Switch."""
