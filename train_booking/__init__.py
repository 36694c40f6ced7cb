"""
Train seat booking demo.

Loads a fixed-format file of train departures and lets a user browse the
trains, pick a window or aisle seat and book it:
1. Seat inventories derived from a single seat count
2. Per-train booking sessions gated so only one is open at a time
3. Live seats-remaining counts for each train and the whole catalog

The console front end lives in ``train_booking.main``.
"""

__version__ = "0.1.0"
