from django.db import migrations, models
import apps.people.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Person',
            fields=[
                ('id', models.CharField(default=apps.people.models.generate_person_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('avatar', models.CharField(blank=True, max_length=200, null=True)),
                ('color_name', models.CharField(default='indigo-500', max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'people',
                'ordering': ['name'],
            },
        ),
    ]
