"""
Test utilities package for locale-sync tests.

## Available Modules

### fakes.py
- `FakeProvider`: in-memory translation provider with scripted failures,
  call recording and in-flight tracking
- `SAMPLE_ARTIFACT`: a small i18n module with an English block
- `count_blocks()`: number of blocks a language label has in an artifact
"""
