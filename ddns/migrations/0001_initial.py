from django.db import migrations, models
import django.utils.timezone

import ddns.models
import ddns.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Host',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True,
                                        serialize=False, verbose_name='ID')),
                ('hostname', models.CharField(max_length=32, unique=True,
                                              validators=[ddns.validators.validate_main_zone])),
                ('subzones', ddns.models.SubzonesField(blank=True, default=tuple,
                                                       validators=[ddns.validators.validate_subzones])),
                ('ip', models.GenericIPAddressField(verbose_name='IP Address')),
                ('token', models.CharField(editable=False, max_length=64, unique=True)),
                ('updated_at', models.DateTimeField(db_index=True,
                                                    default=django.utils.timezone.now)),
            ],
            options={
                'ordering': ['hostname'],
            },
        ),
    ]
