"""Hamkke HR package.

Organized by feature modules (attendance, leave, users, notifications, reports)
with a thin Flask controller layer over service/repository layers. All data
lives in an external row store reached through ``database.store.RowStore``.
"""
