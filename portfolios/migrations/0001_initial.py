import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Portfolio',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('template_id', models.CharField(choices=[('minimal', 'Minimalist'), ('modern', 'Modern Dark'), ('creative', 'Creative'), ('corporate', 'Corporate'), ('resume_1', 'Resume Style')], default='minimal', max_length=30)),
                ('profile_id', models.BigIntegerField(blank=True, db_index=True, null=True)),
                ('slug', models.CharField(editable=False, max_length=32, unique=True)),
                ('title', models.CharField(default='My Portfolio', max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('content', models.JSONField(blank=True, default=dict)),
                ('is_published', models.BooleanField(default=False)),
                ('has_been_edited', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='portfolios', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
