"""Repositories — the only layer that issues SQLAlchemy queries.

How to add a new repository:
  1. Create vendorcomply/repositories/my_entity.py
  2. class MyEntityRepository(BaseRepository[MyEntity]):
         model = MyEntity
  3. Add any domain-specific query methods as needed
"""
