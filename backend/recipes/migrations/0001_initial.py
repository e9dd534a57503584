from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='StoredCollection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(help_text="Storage key, e.g. 'recipes'", max_length=100, unique=True)),
                ('value', models.TextField(help_text='Serialized collection (JSON)')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Stored Collection',
                'verbose_name_plural': 'Stored Collections',
                'ordering': ['key'],
            },
        ),
    ]
