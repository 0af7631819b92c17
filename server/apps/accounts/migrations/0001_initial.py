from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Account',
            fields=[
                ('username', models.CharField(help_text='3-20 alphanumeric characters', max_length=20, primary_key=True, serialize=False)),
                ('password_hash', models.CharField(help_text='Encoded salted hash, never the raw password', max_length=128)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Account',
                'verbose_name_plural': 'Accounts',
                'ordering': ['created_at'],
            },
        ),
    ]
