from django.db import migrations, models
import apps.groups.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('people', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Group',
            fields=[
                ('id', models.CharField(default=apps.groups.models.generate_group_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('total_bills', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('members', models.ManyToManyField(blank=True, related_name='contact_groups', to='people.person')),
            ],
            options={
                'db_table': 'contact_groups',
                'ordering': ['name'],
            },
        ),
    ]
