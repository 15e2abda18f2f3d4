"""Service layer — task operations built on the document primitives.

Every public operation returns a ``ServiceResult``; ``LocusError`` raised
by the primitives is converted at this boundary.
"""
