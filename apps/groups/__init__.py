"""
Groups App - Saved Sets of Contacts

A group is a named set of people used to pre-select bill participants in
one step.
"""
