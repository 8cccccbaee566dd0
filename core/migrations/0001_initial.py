from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Semester",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=64)),
                ("ordinal", models.PositiveSmallIntegerField(blank=True, null=True)),
            ],
            options={
                "ordering": ["ordinal", "id"],
            },
        ),
    ]
