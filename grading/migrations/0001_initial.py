from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="GradeBand",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("min_percent", models.DecimalField(decimal_places=2, max_digits=5)),
                ("max_percent", models.DecimalField(decimal_places=2, max_digits=5)),
                ("grade_point", models.DecimalField(decimal_places=2, default=0, max_digits=4)),
                ("grade_letter", models.CharField(max_length=4, unique=True)),
            ],
            options={
                "ordering": ["-min_percent"],
            },
        ),
    ]
