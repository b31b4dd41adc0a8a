from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("complaints", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="complaint",
            name="staff_notes",
            field=models.TextField(blank=True),
        ),
        migrations.AddField(
            model_name="complaint",
            name="public_note",
            field=models.TextField(blank=True),
        ),
        migrations.AddField(
            model_name="complaint",
            name="expected_completion",
            field=models.DateField(blank=True, null=True),
        ),
    ]
