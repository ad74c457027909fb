# Initial schema for bids: Bid

import django.core.serializers.json
import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Bid',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ('currency', models.CharField(default='USD', max_length=3)),
                ('timeline', models.CharField(choices=[('1-2 weeks', '1-2 weeks'), ('2-4 weeks', '2-4 weeks'), ('1-2 months', '1-2 months'), ('2-6 months', '2-6 months'), ('6+ months', '6+ months')], max_length=20)),
                ('proposal', models.TextField(help_text='How the developer plans to deliver the project', max_length=2000)),
                ('message', models.TextField(blank=True, default='', max_length=500)),
                ('milestones', models.JSONField(blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Array of {title, description, amount, due_date, completed}')),
                ('attachments', models.JSONField(blank=True, default=list, help_text='Array of attachment file URLs')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected'), ('withdrawn', 'Withdrawn')], default='pending', max_length=20)),
                ('accepted_at', models.DateTimeField(blank=True, null=True)),
                ('rejected_at', models.DateTimeField(blank=True, null=True)),
                ('withdrawn_at', models.DateTimeField(blank=True, null=True)),
                ('rejection_reason', models.TextField(blank=True, default='')),
                ('developer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bids', to='accounts.developerprofile')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bids', to='projects.project')),
            ],
            options={
                'verbose_name': 'Bid',
                'verbose_name_plural': 'Bids',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['project', 'status'], name='bid_project_status_idx'),
                    models.Index(fields=['developer', 'status'], name='bid_developer_status_idx'),
                ],
                'unique_together': {('project', 'developer')},
            },
        ),
    ]
