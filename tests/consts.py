"""Constants shared across the test-suite."""

TEST_BUCKET_NAME = "test-file-storage-bucket"
TEST_TABLE_NAME = "test-file-storage-table"
TEST_HASH_INDEX_NAME = "HashIndex"
TEST_REGION = "us-east-1"
