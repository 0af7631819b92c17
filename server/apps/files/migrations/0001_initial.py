from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='FileDescriptor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(db_index=True, help_text='Username of the owning account', max_length=20)),
                ('filename', models.CharField(max_length=255)),
                ('content_type', models.CharField(help_text='Content-Type header sent with the upload', max_length=255)),
                ('content_length', models.BigIntegerField(help_text='File size in bytes')),
                ('registered_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'File Descriptor',
                'verbose_name_plural': 'File Descriptors',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('owner', 'filename'), name='files_owner_filename_unique'),
                    models.CheckConstraint(condition=models.Q(('content_length__gte', 0)), name='files_content_length_non_negative'),
                ],
            },
        ),
    ]
