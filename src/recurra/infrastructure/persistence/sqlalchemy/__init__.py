"""SQLAlchemy persistence for recurra."""
