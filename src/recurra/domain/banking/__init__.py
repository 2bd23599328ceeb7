"""Banking context: bank accounts and booked transactions."""
