"""Clientes Service: CRUD HTTP mínimo sobre la tabla de clientes."""
