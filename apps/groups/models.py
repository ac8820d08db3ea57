# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
import uuid


def generate_group_id():
    return str(uuid.uuid4())


class Group(models.Model):
    """Named set of contacts that split bills together."""

    id = models.CharField(primary_key=True, max_length=64, default=generate_group_id, editable=False)
    name = models.CharField(max_length=200)
    members = models.ManyToManyField('people.Person', related_name='contact_groups', blank=True)
    total_bills = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'contact_groups'
        ordering = ['name']

    def __str__(self):
        return self.name

    def member_ids(self):
        return list(self.members.values_list('id', flat=True))
