# ==========================================
# apps/people/models.py
# ==========================================

from django.db import models
import uuid


CURRENT_USER_ID = 'local_me'

VIBRANT_COLORS = [
    'indigo-500',
    'purple-500',
    'emerald-500',
    'teal-500',
    'pink-500',
    'blue-500',
    'orange-500',
]


def generate_person_id():
    return str(uuid.uuid4())


class Person(models.Model):
    """A participant that bill items can be assigned to."""

    id = models.CharField(primary_key=True, max_length=64, default=generate_person_id, editable=False)
    name = models.CharField(max_length=100)
    avatar = models.CharField(max_length=200, blank=True, null=True)
    color_name = models.CharField(max_length=30, default='indigo-500')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'people'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_current_user(self):
        return self.id == CURRENT_USER_ID
