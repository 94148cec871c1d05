"""
Test data factories: real testnet values and statement DTO builders.
"""

# TATNE7Q5BITMUTRRN6IB4I7FLSDRDWZA37JGO5Q
TESTNET_ADDRESS_HEX = "9826D27E1D0A26CA4E316F901E23E55C8711DB20DFD26776"
TESTNET_ADDRESS_PLAIN = "TATNE7Q5BITMUTRRN6IB4I7FLSDRDWZA37JGO5Q"
# SBILTA367K2LX2FEXG5TFWAS7GEFYAGY7QLFBYI
MIJIN_TEST_ADDRESS_HEX = "9050B9837EFAB4BBE8A4B9BB32D812F9885C00D8FC1650E1"
MIJIN_TEST_ADDRESS_PLAIN = "SBILTA367K2LX2FEXG5TFWAS7GEFYAGY7QLFBYI"

SYMBOL_NAMESPACE_HEX = "A95F1F8A96159516"
SYMBOL_XYM_NAMESPACE_HEX = "E74B99BA41F4AFEE"
# testnet unresolved address aliasing symbol.xym
SYMBOL_XYM_UNRESOLVED_ADDRESS = "99EEAFF441BA994BE7" + "0" * 30

CURRENCY_MOSAIC_HEX = "6BED913FA20223F8"
OTHER_MOSAIC_HEX = "3A8416DB2D53B6C8"


def source_dto(primary_id, secondary_id=0):
    return {"primaryId": primary_id, "secondaryId": secondary_id}


def make_statement_dto():
    """Block statement with six receipt kinds and two resolutions of each type."""
    return {
        "transactionStatements": [
            {"statement": {
                "height": "1500",
                "source": source_dto(0),
                "receipts": [{
                    "version": 1,
                    "type": 8515,
                    "targetAddress": TESTNET_ADDRESS_HEX,
                    "mosaicId": CURRENCY_MOSAIC_HEX,
                    "amount": "1000",
                }],
            }},
            {"statement": {
                "height": "1500",
                "source": source_dto(1),
                "receipts": [{
                    "version": 1,
                    "type": 4685,
                    "senderAddress": TESTNET_ADDRESS_HEX,
                    "recipientAddress": MIJIN_TEST_ADDRESS_HEX,
                    "mosaicId": CURRENCY_MOSAIC_HEX,
                    "amount": "500",
                }],
            }},
            {"statement": {
                "height": "1500",
                "source": source_dto(0),
                "receipts": [{"version": 1, "type": 16717, "artifactId": OTHER_MOSAIC_HEX}],
            }},
            {"statement": {
                "height": "1500",
                "source": source_dto(0),
                "receipts": [{"version": 1, "type": 16718, "artifactId": SYMBOL_NAMESPACE_HEX}],
            }},
            {"statement": {
                "height": "1500",
                "source": source_dto(0),
                "receipts": [{
                    "version": 1,
                    "type": 20803,
                    "mosaicId": CURRENCY_MOSAIC_HEX,
                    "amount": "95000000",
                }],
            }},
            {"statement": {
                "height": "1500",
                "source": source_dto(2),
                "receipts": [{
                    "version": 1,
                    "type": 0x3148,
                    "targetAddress": TESTNET_ADDRESS_HEX,
                    "mosaicId": CURRENCY_MOSAIC_HEX,
                    "amount": "10000000",
                }],
            }},
        ],
        "addressResolutionStatements": [
            {"statement": {
                "height": "1500",
                "unresolved": SYMBOL_XYM_UNRESOLVED_ADDRESS,
                "resolutionEntries": [
                    {"source": source_dto(1), "resolved": TESTNET_ADDRESS_HEX},
                    {"source": source_dto(3), "resolved": MIJIN_TEST_ADDRESS_HEX},
                ],
            }},
            {"statement": {
                "height": "1500",
                "unresolved": {"address": MIJIN_TEST_ADDRESS_PLAIN, "networkType": 144},
                "resolutionEntries": [
                    {"source": source_dto(2), "resolved": TESTNET_ADDRESS_HEX},
                ],
            }},
        ],
        "mosaicResolutionStatements": [
            {"statement": {
                "height": "1500",
                "unresolved": SYMBOL_XYM_NAMESPACE_HEX,
                "resolutionEntries": [
                    {"source": source_dto(1), "resolved": CURRENCY_MOSAIC_HEX},
                    {"source": source_dto(5, 2), "resolved": OTHER_MOSAIC_HEX},
                ],
            }},
            {"statement": {
                "height": "1500",
                "unresolved": {"id": SYMBOL_NAMESPACE_HEX, "name": "symbol"},
                "resolutionEntries": [
                    {"source": source_dto(1), "resolved": OTHER_MOSAIC_HEX},
                ],
            }},
        ],
    }
