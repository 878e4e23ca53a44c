"""
jobs — job postings CRUD.

Provides:
  • ``JobRepository`` over the ``jobs`` table
  • ``/api/jobs`` routes (list with paging, fetch, create, update, delete)
"""
