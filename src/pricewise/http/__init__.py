from pricewise.http.module import PricingHttpModule, create_app

__all__ = ["PricingHttpModule", "create_app"]
