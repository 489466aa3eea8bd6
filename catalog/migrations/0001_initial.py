from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("price_cents", models.IntegerField()),
                ("image_url", models.URLField(blank=True, max_length=500)),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["price_cents"], name="product_price_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("price_cents__gte", 0)), name="product_price_non_negative"
                    )
                ],
            },
        ),
    ]
