"""Web dashboard and Google data proxy."""
