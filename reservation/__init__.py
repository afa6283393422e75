"""
Railway Reservation System

Seat allocation per train and class, FIFO waitlists, cancellation with
automatic waitlist promotion, PNR lookup and save/load of the whole state
to a data file. The same booking engine is driven from a console menu
(``python -m reservation``) and from a FastAPI application
(``reservation.main.create_app``).
"""

__version__ = "1.0.0"
