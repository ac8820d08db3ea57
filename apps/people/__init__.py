"""
People App - Contacts and the Current Device User

Holds the Person registry that bills reference by id. The device owner is a
regular Person with a reserved id, created lazily the first time anything
asks for it.
"""
