# Initial schema for projects: Project

import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('title', models.CharField(max_length=100)),
                ('description', models.TextField(help_text='Detailed project description, goals, and expectations', max_length=2000)),
                ('category', models.CharField(choices=[('web-development', 'Web Development'), ('mobile-development', 'Mobile Development'), ('design', 'Design'), ('data-science', 'Data Science'), ('ai-ml', 'AI / ML'), ('devops', 'DevOps'), ('other', 'Other')], max_length=30)),
                ('skills', models.JSONField(blank=True, default=list, help_text='Array of required skill keywords')),
                ('complexity', models.CharField(choices=[('simple', 'Simple'), ('moderate', 'Moderate'), ('complex', 'Complex'), ('expert', 'Expert')], default='moderate', max_length=20)),
                ('budget_min', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ('budget_max', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ('budget_currency', models.CharField(default='USD', max_length=3)),
                ('timeline', models.CharField(choices=[('1-2 weeks', '1-2 weeks'), ('2-4 weeks', '2-4 weeks'), ('1-2 months', '1-2 months'), ('2-6 months', '2-6 months'), ('6+ months', '6+ months')], max_length=20)),
                ('deadline', models.DateTimeField(help_text='Must be in the future when posted')),
                ('requirements', models.JSONField(blank=True, default=list)),
                ('deliverables', models.JSONField(blank=True, default=list, help_text='Array of expected deliverables')),
                ('attachments', models.JSONField(blank=True, default=list, help_text='Array of attachment file URLs')),
                ('status', models.CharField(choices=[('open', 'Open for Bids'), ('in-progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='open', max_length=20)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to=settings.AUTH_USER_MODEL)),
                ('selected_developer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_projects', to='accounts.developerprofile')),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'category'], name='project_status_cat_idx'),
                    models.Index(fields=['owner', 'status'], name='project_owner_status_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('budget_min__lte', models.F('budget_max'))), name='project_budget_min_lte_max'),
                ],
            },
        ),
    ]
