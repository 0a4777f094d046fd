from catalog_price.domain.monetary.currency import Currency


CZK = Currency("CZK", 2, "Czech Koruna", symbol="Kč")
EUR = Currency("EUR", 2, "Euro", symbol="€")
USD = Currency("USD", 2, "US Dollar", symbol="$")
GBP = Currency("GBP", 2, "British Pound", symbol="£")
PLN = Currency("PLN", 2, "Polish Zloty", symbol="zł")
HUF = Currency("HUF", 2, "Hungarian Forint", symbol="Ft")

# No minor unit in circulation
JPY = Currency("JPY", 0, "Japanese Yen", symbol="¥")

# Register all predefined currencies
Currency.register(CZK, overwrite=True)
Currency.register(EUR, overwrite=True)
Currency.register(USD, overwrite=True)
Currency.register(GBP, overwrite=True)
Currency.register(PLN, overwrite=True)
Currency.register(HUF, overwrite=True)
Currency.register(JPY, overwrite=True)
