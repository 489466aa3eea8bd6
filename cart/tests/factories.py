import factory
from cart.models import Cart, CartItem
from factory.django import DjangoModelFactory


class CartFactory(DjangoModelFactory):
    class Meta:
        model = Cart

    user = factory.SubFactory("users.tests.factories.UserFactory")
    status = Cart.STATUS_ACTIVE


class CartItemFactory(DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    quantity = 1
